"""Stroke Artist - Main entry point."""

import sys

from PyQt6.QtWidgets import QApplication

from stroke_artist.ui.main_window import ArtistWindow


def main():
    """Launch the stroke artist application."""
    app = QApplication(sys.argv)

    app.setApplicationDisplayName("Stroke Artist")
    app.setApplicationName("StrokeArtist")

    window = ArtistWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
