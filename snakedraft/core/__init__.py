"""Core draft logic: models, turn order, board analysis and the pick recorder."""
