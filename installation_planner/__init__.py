"""Floor-plan installation planner: markers, rooms and material counts."""
