# -*- coding: utf-8 -*-

"""
Main entry point for launching the guidebook viewer.

Usage: ``python run.py [content_root] [selected_entry_id]``
"""

import logging
import sys
import tkinter as tk

from guidebook.config import ConfigManager
from guidebook.logging_config import setup_logging
from guidebook.app import GuidebookApp


def main():
    """
    Configure logging, main window, and launch application.
    """
    setup_logging()

    args = sys.argv[1:]
    content_root = args[0] if len(args) > 0 else None
    selected = args[1] if len(args) > 1 else None

    window_cfg = ConfigManager().get_window_config()
    root = tk.Tk()
    root.title(str(window_cfg.get("title") or "Guidebook"))
    window_width = int(window_cfg.get("width") or 900)
    window_height = int(window_cfg.get("height") or 620)
    # Center the window
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    # Use modern theme if available
    theme = ConfigManager().get_guidebook_config().get("theme")
    if theme:
        try:
            from sv_ttk import set_theme
            set_theme(theme)
        except ImportError:
            logging.warning("'sv-ttk' theme is not installed.")

    GuidebookApp(root, content_root=content_root, selected=selected)

    root.mainloop()


if __name__ == '__main__':
    main()

    logging.info("===== Application terminated =====")
