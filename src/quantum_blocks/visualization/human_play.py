from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict

import pygame

from quantum_blocks.game import GameConfig, GameSession, GameState
from .renderer import Renderer


KEY_TO_INPUT: Dict[int, Callable[[GameSession], GameState]] = {
    pygame.K_LEFT: GameSession.move_left,
    pygame.K_RIGHT: GameSession.move_right,
    pygame.K_UP: GameSession.rotate,
    pygame.K_DOWN: GameSession.soft_drop_start,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Quantum Blocks")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer")
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--verbose", action="store_true", help="Log engine and timer events")
    return p


def run(config: GameConfig, cell_size: int = 28) -> None:
    pygame.init()
    session = GameSession(config)
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=cell_size)
        state = session.start_new_game()

        screen = pygame.display.set_mode(renderer.window_size(state))
        pygame.display.set_caption("Quantum Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        session.start_new_game()
                    else:
                        handler = KEY_TO_INPUT.get(event.key)
                        if handler is not None:
                            handler(session)
                elif event.type == pygame.KEYUP and event.key == pygame.K_DOWN:
                    session.soft_drop_stop()

            # Timers advance the game; this loop only draws the latest snapshot
            renderer.draw(screen, session.state)
            clock.tick(60)

        final = session.state
        print(f"Final score: {final.score} (level {final.level}, {final.lines_cleared_total} lines)")
    finally:
        session.close()
        pygame.quit()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(threadName)s %(name)s: %(message)s")
    try:
        config = GameConfig(width=args.width, height=args.height, random_seed=args.seed)
    except ValueError as e:
        parser.error(str(e))
    run(config, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
