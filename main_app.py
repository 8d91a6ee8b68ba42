"""
Star Map - Main Application

Naked-eye sky for an observer on Earth, either as a point-of-view
camera ("pov") or a zenith-centred all-sky disk ("allsky").

Settings come from SKYMAP_* environment variables, see app/config.py.
"""

import logging
import sys
from pathlib import Path

import pygame

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from app.config import AppConfig
from app.state_manager import SkyController
from catalogs import load_catalog
from core.errors import SkymapError
from core.time_controller import TimeController
from ui.screen_skychart import SkychartScreen

TITLE = "Star Map"

logger = logging.getLogger("skymap")


class StarMapApp:
    """
    Main application

    Owns the window and the frame loop; everything else lives in the
    SkyController.
    """

    def __init__(self, config: AppConfig):
        self.config = config

        catalog = load_catalog(config.catalog_path, config.magnitude_limit, config.csv_separator)

        pygame.init()
        self.fullscreen = False
        self.screen = pygame.display.set_mode((config.width, config.height), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()

        self.controller = SkyController(catalog, mode=config.mode,
                                        width=config.width, height=config.height,
                                        clock=TimeController(refresh_interval=config.refresh_interval))
        self.controller.load_session(config.session_file)
        self.controller.refresh()

        self.skychart = SkychartScreen(self.controller)
        self.running = True
        logger.info("%s started in %s mode (%dx%d)", TITLE, config.mode, config.width, config.height)

    def run(self):
        """Main loop"""
        while self.running:
            dt = self.clock.tick(self.config.fps) / 1000.0

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self.running = False
                    elif event.key == pygame.K_F11:
                        self.toggle_fullscreen()
                elif event.type == pygame.VIDEORESIZE:
                    self.handle_resize(event.w, event.h)

            changed = self.skychart.handle_input(events)
            changed = self.skychart.update(dt) or changed

            if changed or self.controller.needs_render:
                self.skychart.render(self.screen)
                pygame.display.flip()

        self.quit()

    def toggle_fullscreen(self):
        """Toggle between fullscreen and windowed mode"""
        self.fullscreen = not self.fullscreen

        if self.fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = self.config.width, self.config.height
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.controller.resize(width, height)
        logger.debug("Display mode changed to %dx%d", width, height)

    def handle_resize(self, width: int, height: int):
        """Window resize; the viewport itself is resized by the interaction controller."""
        if not self.fullscreen:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            logger.debug("Window resized to %dx%d", width, height)

    def quit(self):
        self.controller.save_session(self.config.session_file)
        logger.info("Shutting down")
        pygame.quit()


def main():
    """Entry point"""
    try:
        config = AppConfig.from_env()
    except SkymapError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration: %s", e)
        return 2

    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    try:
        app = StarMapApp(config)
        app.run()
    except SkymapError as e:
        logger.error("%s", e)
        pygame.quit()
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
