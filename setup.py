from pathlib import Path

from setuptools import find_packages, setup

setup(
    name="installation_planner",
    version=Path("./installation_planner/VERSION").read_text().strip(),
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"installation_planner": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python-headless",
        "easydict",
        "requests",
        "reportlab",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["installation_planner=installation_planner.cli:main"]
    },
)
