"""Path resolution and response construction for SLPK assets."""
