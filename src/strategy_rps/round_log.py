import csv
import os
import time

from strategy_rps.game_logic import RoundOutcome

HEADER = ["ts", "player", "ai", "result", "strategy"]


def get_round_csv(out_dir: str) -> str:
    csv_path = os.path.join(out_dir, "round_log.csv")
    if not os.path.exists(csv_path):
        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(HEADER)
    return csv_path


def log_round(csv_path: str, outcome: RoundOutcome) -> None:
    with open(csv_path, "a", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow([
            f"{time.time():.3f}",
            outcome.player_move.value,
            outcome.computer_move.value,
            outcome.result.value,
            outcome.strategy_name,
        ])
