"""nanal - calendar occurrence and goal-bar layout engine."""
