from .main_window import NotesApp, initial_folder

__all__ = ["NotesApp", "initial_folder"]
