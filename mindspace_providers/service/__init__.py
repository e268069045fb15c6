"""Gateway services: chat orchestration and the command-line interface."""
