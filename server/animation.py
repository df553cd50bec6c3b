import sys

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.patches import Rectangle

from domain.game import Game

KEY_NAMES = {"left": "ArrowLeft", "right": "ArrowRight", "up": "ArrowUp", "down": "ArrowDown"}


def show_animation(game: Game, dt):
    fig, ax = plt.subplots(figsize=(4.5, 6))
    court = game.court

    # Canvas with y growing downward, like the browser canvas
    ax.set_xlim(0, court.width)
    ax.set_ylim(court.height, 0)
    ax.set_aspect("equal")
    ax.set_facecolor("#00A550")
    ax.add_patch(Rectangle((court.left, court.top), court.right - court.left, court.bottom - court.top,
                           fill=False, edgecolor="white", alpha=0.5))
    ax.axhline(court.net_y, color="white", linewidth=3)

    snapshot = game.snapshot()
    computer = Rectangle((0, 0), snapshot["computer_paddle"]["width"], snapshot["computer_paddle"]["height"],
                         color="#3498db")
    player = Rectangle((0, 0), snapshot["player_paddle"]["width"], snapshot["player_paddle"]["height"],
                       color="#2ecc71")
    ball = Rectangle((0, 0), snapshot["ball"]["width"], snapshot["ball"]["height"], color="#FFFF00")
    for patch in (computer, player, ball):
        ax.add_patch(patch)
    status = ax.text(court.width / 2, court.height / 2 - 60, "", ha="center", color="white", fontsize=14)

    pressed = {key: False for key in KEY_NAMES.values()}

    def on_press(event):
        if event.key in KEY_NAMES:
            pressed[KEY_NAMES[event.key]] = True
            game.set_keys(pressed)
        elif event.key == " ":
            if not game.start():
                game.toggle_pause()
        elif event.key == "n":
            game.reset()

    def on_release(event):
        if event.key in KEY_NAMES:
            pressed[KEY_NAMES[event.key]] = False
            game.set_keys(pressed)

    fig.canvas.mpl_connect("key_press_event", on_press)
    fig.canvas.mpl_connect("key_release_event", on_release)

    def update(frame):
        game.scheduler.run_due()
        game.update()

        # Draw from the snapshot only, never from live state
        state = game.snapshot()
        computer.set_xy((state["computer_paddle"]["x"], state["computer_paddle"]["y"]))
        player.set_xy((state["player_paddle"]["x"], state["player_paddle"]["y"]))
        ball.set_xy((state["ball"]["x"], state["ball"]["y"]))

        match = state["match"]
        ax.set_title(f"Computer {match['computer_score']} - {match['player_score']} Player "
                     f"({state['difficulty']})")
        ax.patch.set_alpha(state["animation"]["fade_opacity"])
        if match["state"] == "ended":
            status.set_text("YOU WIN!" if match["winner"] == "player" else "GAME OVER")
        elif match["state"] == "not_started":
            status.set_text("Press SPACE to start")
        elif match["state"] == "paused":
            status.set_text("PAUSED")
        else:
            status.set_text("")
        return computer, player, ball, status

    ani = FuncAnimation(fig, update, interval=dt * 1000, blit=False, cache_frame_data=False)

    # Show the plot
    plt.show()
    return ani


if __name__ == "__main__":
    dt = 1/60  # seconds per frame
    difficulty = sys.argv[1] if len(sys.argv) > 1 else "beginner"
    show_animation(Game(difficulty=difficulty), dt)
