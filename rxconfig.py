"""Reflex configuration for the FinOps UI application."""

import os

import reflex as rx

APP_PORT = int(os.getenv("FINOPS_UI_PORT", "8000"))

config = rx.Config(
    app_name="finops_ui",
    # Use the src directory structure
    app_module_import="finops_ui.app",
    frontend_port=APP_PORT,
)
