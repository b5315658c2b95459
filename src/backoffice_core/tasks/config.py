"""Configuration constants for checklists and the admin task board."""

# Recorded as the assigner when a checklist task is added without one
DEFAULT_ASSIGNED_BY = "Admin"

# Recorded as the finalizer when a checklist is archived without a name
DEFAULT_FINALIZED_BY = "Sistema"

# Estimated time written on admin tasks created without one
DEFAULT_ESTIMATED_TIME = "N/A"
