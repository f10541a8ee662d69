"""Domain commands for the module repository."""
