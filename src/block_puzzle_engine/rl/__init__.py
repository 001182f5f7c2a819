"""Command line agents driving the engine through its gymnasium environment."""
