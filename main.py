import argparse
import logging

import pygame

from config import *
from scene import Scene
from sound_manager import SoundManager, init_mixer
from sparkle_generator import SparkleGenerator

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Bouncing shapes with retro sparkle sounds.")
    parser.add_argument('--windowed', action='store_true', help=f"run in a {WINDOW_SIZE[0]}x{WINDOW_SIZE[1]} window")
    parser.add_argument('--regenerate', action='store_true', help="rebuild the sparkle sounds before starting")
    parser.add_argument('-v', '--verbose', action='store_true', help="debug logging")
    return parser.parse_args(argv)

# ---------------------- Main ----------------------
def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    generator = SparkleGenerator()
    if args.regenerate:
        generator.invalidate()

    init_mixer()
    pygame.init()
    if args.windowed:
        screen = pygame.display.set_mode(WINDOW_SIZE)
    else:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    pygame.display.set_caption("sparkle shapes  [Esc/Q: quit]")
    pygame.mixer.set_num_channels(32)
    clock = pygame.time.Clock()
    logger.info("display %dx%d", *screen.get_size())

    sounds = SoundManager(generator)
    scene = Scene(*screen.get_size(), sound=sounds)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                running = False
        scene.update()
        scene.draw(screen)
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()

if __name__ == "__main__":
    main()
