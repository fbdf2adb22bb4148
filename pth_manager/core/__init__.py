"""Core — configuration, models, services and the scope state machine."""
