"""Domain layer: options, statuses, dispositions and timing."""
