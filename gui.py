import argparse
import logging

import pygame

from game import WIN, X, InvalidMove, TicTacToe
from minimax_ai import MinimaxAI
from utils import load_sounds, setup_logging

logger = logging.getLogger(__name__)

# Board geometry (pixels)
BOARD_LEFT, BOARD_TOP = 100, 200
BOARD_WIDTH, BOARD_HEIGHT = 600, 450
BOARD_ROWS, BOARD_COLS = 3, 3
CELL_WIDTH = BOARD_WIDTH // BOARD_COLS
CELL_HEIGHT = BOARD_HEIGHT // BOARD_ROWS


def cell_at(pos):
    """Map a window coordinate to a cell index (0-8), or None outside the board."""
    x, y = pos
    board_x = x - BOARD_LEFT
    board_y = y - BOARD_TOP
    if not (0 <= board_x < BOARD_WIDTH and 0 <= board_y < BOARD_HEIGHT):
        return None
    col = board_x // CELL_WIDTH
    row = board_y // CELL_HEIGHT
    return row * BOARD_COLS + col


def cell_center(index):
    row, col = divmod(index, BOARD_COLS)
    return (BOARD_LEFT + col * CELL_WIDTH + CELL_WIDTH // 2,
            BOARD_TOP + row * CELL_HEIGHT + CELL_HEIGHT // 2)


class TicTacToeGUI:
    # Constants
    WIDTH, HEIGHT = 800, 800
    LINE_WIDTH = 15
    FPS = 60

    THEMES = {
        'light': {
            'bg': (240, 240, 245),
            'board': (255, 255, 255),
            'grid': (80, 80, 80),
            'text': (0, 0, 0),
            'muted': (120, 120, 120),
            'x': (220, 50, 50),
            'o': (50, 120, 220),
            'shadow': (80, 80, 80),
            'button': (100, 170, 255),
            'hover': (170, 255, 170),
        },
        'dark': {
            'bg': (26, 26, 46),
            'board': (22, 33, 62),
            'grid': (150, 150, 170),
            'text': (235, 235, 235),
            'muted': (160, 160, 180),
            'x': (255, 107, 107),
            'o': (0, 212, 255),
            'shadow': (10, 10, 20),
            'button': (45, 55, 72),
            'hover': (74, 222, 128),
        },
    }

    def __init__(self, theme='light', mute=False):
        pygame.init()

        self.screen = pygame.display.set_mode((self.WIDTH, self.HEIGHT))
        pygame.display.set_caption("Tic-Tac-Toe")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 36)
        self.title_font = pygame.font.Font(None, 60)

        self.theme = theme
        self.sounds = {} if mute else load_sounds()

        self.game = TicTacToe()
        self.ai = MinimaxAI()

        # Animation tracking
        self.animations = []
        self.win_animation = None

    @property
    def colors(self):
        return self.THEMES[self.theme]

    def toggle_theme(self):
        self.theme = 'dark' if self.theme == 'light' else 'light'
        logger.debug("Theme switched to %s", self.theme)

    def draw_button(self, text, x, y, width, height):
        button_rect = pygame.Rect(x, y, width, height)
        hovered = button_rect.collidepoint(pygame.mouse.get_pos())
        color = self.colors['hover'] if hovered else self.colors['button']

        pygame.draw.rect(self.screen, color, button_rect, 0, border_radius=10)
        pygame.draw.rect(self.screen, self.colors['grid'], button_rect, 2, border_radius=10)

        text_surf = self.font.render(text, True, self.colors['text'])
        self.screen.blit(text_surf, text_surf.get_rect(center=button_rect.center))
        return button_rect

    def draw_scoreboard(self):
        board_width = 240
        board_height = 150
        x = self.WIDTH // 2 - board_width // 2
        y = 20

        pygame.draw.rect(self.screen, self.colors['board'], (x, y, board_width, board_height), 0, border_radius=10)
        pygame.draw.rect(self.screen, self.colors['grid'], (x, y, board_width, board_height), 2, border_radius=10)

        title_text = self.font.render("SCOREBOARD", True, self.colors['text'])
        self.screen.blit(title_text, (x + board_width // 2 - title_text.get_width() // 2, y + 15))

        scores = self.game.scores
        rows = [
            (f"You (X): {scores['X']}", self.colors['x']),
            (f"AI (O): {scores['O']}", self.colors['o']),
            (f"Draws: {scores['Draw']}", self.colors['muted']),
        ]
        for i, (label, color) in enumerate(rows):
            score_text = self.font.render(label, True, color)
            self.screen.blit(score_text, (x + 20, y + 50 + i * 30))

    def draw_board(self):
        self.screen.fill(self.colors['bg'])

        board_rect = pygame.Rect(BOARD_LEFT, BOARD_TOP, BOARD_WIDTH, BOARD_HEIGHT)
        pygame.draw.rect(self.screen, self.colors['board'], board_rect, 0, border_radius=15)
        pygame.draw.rect(self.screen, self.colors['grid'], board_rect, 3, border_radius=15)

        for row in range(1, BOARD_ROWS):
            y_pos = BOARD_TOP + row * CELL_HEIGHT
            pygame.draw.line(self.screen, self.colors['grid'], (BOARD_LEFT + 10, y_pos),
                             (BOARD_LEFT + BOARD_WIDTH - 10, y_pos), self.LINE_WIDTH // 2)
        for col in range(1, BOARD_COLS):
            x_pos = BOARD_LEFT + col * CELL_WIDTH
            pygame.draw.line(self.screen, self.colors['grid'], (x_pos, BOARD_TOP + 10),
                             (x_pos, BOARD_TOP + BOARD_HEIGHT - 10), self.LINE_WIDTH // 2)

        if not self.game.is_game_over():
            turn_text = "Your turn (X)"
            turn_surf = self.font.render(turn_text, True, self.colors['text'])
            self.screen.blit(turn_surf, (self.WIDTH // 2 - turn_surf.get_width() // 2, self.HEIGHT - 120))

        restart_rect = self.draw_button("Restart", self.WIDTH // 2 - 100, self.HEIGHT - 70, 200, 40)
        theme_rect = self.draw_button("Theme", self.WIDTH - 200, self.HEIGHT - 70, 100, 40)
        return restart_rect, theme_rect

    def draw_marks(self):
        size = min(CELL_WIDTH, CELL_HEIGHT) // 2 - 15

        active_animations = []
        for anim in self.animations:
            anim.update()
            if not anim.complete:
                active_animations.append(anim)
        self.animations = active_animations
        animated_cells = {anim.index for anim in self.animations}

        for index, mark in enumerate(self.game.board):
            if mark is None or index in animated_cells:
                continue
            draw_mark(self.screen, mark, cell_center(index), size, self.LINE_WIDTH, self.colors)

        for anim in self.animations:
            anim.draw(self.screen, self.LINE_WIDTH, self.colors)

        if self.win_animation:
            self.win_animation.update()
            self.win_animation.draw(self.screen, self.LINE_WIDTH)

    def display_winner(self):
        outcome = self.game.outcome
        if outcome.status == WIN:
            result_text = "You win!" if outcome.winner == X else "AI wins!"
            color = self.colors['x'] if outcome.winner == X else self.colors['o']
        else:
            result_text = "Draw!"
            color = self.colors['text']

        text_surf = self.title_font.render(result_text, True, color)
        bg_rect = text_surf.get_rect(center=(self.WIDTH // 2, self.HEIGHT - 120))
        bg_rect.inflate_ip(40, 20)
        pygame.draw.rect(self.screen, self.colors['board'], bg_rect, 0, border_radius=15)
        pygame.draw.rect(self.screen, color, bg_rect, 3, border_radius=15)
        self.screen.blit(text_surf, text_surf.get_rect(center=bg_rect.center))

    def place(self, index):
        outcome = self.game.make_move(index)
        self.animations.append(MarkAnimation(self.game.board[index], index))
        if outcome.is_over:
            self.on_game_over(outcome)
        return outcome

    def handle_cell_click(self, mouse_pos):
        index = cell_at(mouse_pos)
        if index is None:
            return None
        try:
            outcome = self.place(index)
        except InvalidMove as e:
            logger.debug("Ignoring click on cell %d: %s", index, e)
            return None

        if not outcome.is_over:
            self.ai_move()
        return index

    def ai_move(self):
        index = self.ai.best_move(self.game.board)
        logger.debug("AI plays %d", index)
        self.place(index)

    def on_game_over(self, outcome):
        sound = self.sounds.get('win' if outcome.status == WIN else 'draw')
        if sound is not None:
            sound.play()
        if outcome.status == WIN:
            start, end = cell_center(outcome.line[0]), cell_center(outcome.line[-1])
            color = self.colors['x'] if outcome.winner == X else self.colors['o']
            self.win_animation = WinLineAnimation(start, end, color)

    def reset_game(self):
        self.game.reset_game()
        self.animations = []
        self.win_animation = None

    def run_game(self):
        running = True

        while running:
            restart_rect, theme_rect = self.draw_board()
            self.draw_marks()
            self.draw_scoreboard()
            if self.game.is_game_over():
                self.display_winner()

            pygame.display.update()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if restart_rect.collidepoint(event.pos):
                        self.reset_game()
                    elif theme_rect.collidepoint(event.pos):
                        self.toggle_theme()
                    elif not self.game.is_game_over() and self.game.current_player == X:
                        self.handle_cell_click(event.pos)

            self.clock.tick(self.FPS)
        pygame.quit()


def draw_mark(screen, mark, center, size, line_width, colors, offset=5):
    center_x, center_y = center
    if mark == X:
        for dx in (0, offset):
            color = colors['shadow'] if dx else colors['x']
            pygame.draw.line(screen, color,
                             (center_x - size + dx, center_y - size + dx),
                             (center_x + size + dx, center_y + size + dx), line_width)
            pygame.draw.line(screen, color,
                             (center_x + size + dx, center_y - size + dx),
                             (center_x - size + dx, center_y + size + dx), line_width)
    else:
        pygame.draw.circle(screen, colors['shadow'], (center_x + offset, center_y + offset), size, line_width)
        pygame.draw.circle(screen, colors['o'], (center_x, center_y), size, line_width)


class MarkAnimation:
    """Animation for X and O markers appearing on the board"""
    def __init__(self, mark, index):
        self.mark = mark
        self.index = index
        self.final_size = min(CELL_WIDTH, CELL_HEIGHT) // 2 - 15
        self.current_size = 0
        self.growth_speed = self.final_size / 8  # Takes 8 frames to reach full size
        self.complete = False

    def update(self):
        if self.current_size < self.final_size:
            self.current_size += self.growth_speed
        else:
            self.current_size = self.final_size
            self.complete = True

    def draw(self, screen, line_width, colors):
        size = int(self.current_size)
        if size <= 0:
            return
        draw_mark(screen, self.mark, cell_center(self.index), size, line_width, colors)


class WinLineAnimation:
    """Animation for the winning line"""
    def __init__(self, start_pos, end_pos, color):
        self.start_pos = start_pos
        self.end_pos = end_pos
        self.color = color
        self.current_length = 0
        self.total_length = ((end_pos[0] - start_pos[0])**2 +
                             (end_pos[1] - start_pos[1])**2)**0.5
        self.growth_speed = self.total_length / 15  # Takes 15 frames to complete
        self.complete = False

    def update(self):
        if self.current_length < self.total_length:
            self.current_length += self.growth_speed
        else:
            self.current_length = self.total_length
            self.complete = True

    def draw(self, screen, line_width):
        progress = min(1.0, self.current_length / self.total_length)
        current_x = self.start_pos[0] + (self.end_pos[0] - self.start_pos[0]) * progress
        current_y = self.start_pos[1] + (self.end_pos[1] - self.start_pos[1]) * progress

        pygame.draw.line(screen, self.color, self.start_pos, (current_x, current_y), line_width)


def build_parser():
    p = argparse.ArgumentParser(prog="tictactoe", description="Play tic-tac-toe against an unbeatable AI")
    p.add_argument("--theme", choices=sorted(TicTacToeGUI.THEMES), default="light", help="initial colour theme")
    p.add_argument("--mute", action="store_true", help="disable win/draw sounds")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    gui = TicTacToeGUI(theme=args.theme, mute=args.mute)
    gui.run_game()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
