"""Preview palette."""
