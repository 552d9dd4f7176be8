"""Client-side controller for a multi-stop trip planner."""
