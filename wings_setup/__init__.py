"""
Interactive setup for the Pterodactyl Wings daemon: configuration models,
compatibility checks and operator prompts.
"""
