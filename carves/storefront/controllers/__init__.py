"""Screen controllers."""
