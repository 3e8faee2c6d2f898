"""PySide6 playground hosting the shapedrag demo scene."""
