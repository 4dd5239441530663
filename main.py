
import logging
import pygame, sys
from tetris_config import CONFIG, setup_logging
from tetris_board import Board
from tetris_engine import GameEngine
from tetris_input import InputTimingController
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import Renderer
from tetris_rng import PieceRandomizer

log = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def build_game(screen, dims, font, big_font=None):
    controller = InputTimingController()
    renderer = Renderer(screen, dims, font, big_font)
    engine = GameEngine(
        board=Board(dims.cols, dims.rows),
        controller=controller,
        randomizer=PieceRandomizer(CONFIG["SEED"]),
        renderer=renderer,
        status=renderer,
    )
    return engine


def main():
    setup_logging()
    pygame.init()
    pygame.event.set_allowed([
        pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP,
        pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP,
        pygame.FINGERDOWN, pygame.FINGERUP,
    ])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    engine = build_game(screen, dims, font, big_font)
    overlay = Overlay(engine.controller)
    clock = pygame.time.Clock()
    log.info("started %dx%d board", dims.cols, dims.rows)

    while engine.running:
        dt = clock.tick_busy_loop(CONFIG["FPS"])

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                engine.destroy(); break
            if e.type == pygame.KEYDOWN and e.key == pygame.K_F1:
                overlay.toggle()
                if overlay.active: engine.controller.release_held()
                continue
            if overlay.active:
                if e.type == pygame.KEYDOWN: overlay.handle(e)
                continue
            engine.controller.handle_event(e, dims)

        if not engine.running:
            break

        if overlay.active:
            engine.render()
            overlay.draw(screen, font, dims)
        else:
            engine.tick(dt)
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == '__main__':
    sys.exit(main())
