"""Output layer: rendering CommandResult for humans or machines."""
