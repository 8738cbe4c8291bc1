"""Dashboard web app for the automation console."""
