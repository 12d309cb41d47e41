"""Optional FastAPI service exposing the embed token workflow."""
