from loguru import logger

from strategy_rps.config import configure_logging, ensure_outputs_dir, load_config
from strategy_rps.game_logic import parse_move
from strategy_rps.round_log import get_round_csv, log_round
from strategy_rps.session import GameSession

PROMPT = "Choose your move - [r]ock, [p]aper, [s]cissors, [q]uit: "


def make_session(cfg: dict) -> GameSession:
    on_round = None
    if bool(cfg["logging"].get("round_csv", False)):
        csv_path = get_round_csv(ensure_outputs_dir(cfg["logging"]["out_dir"]))
        logger.info(f"Logging rounds to {csv_path}")
        on_round = lambda outcome: log_round(csv_path, outcome)
    return GameSession.from_config(cfg, on_round=on_round)


def render(outcome, tally) -> str:
    return f"{outcome.describe()}\n{tally.format_line()}"


def run(session: GameSession, read=input, write=print) -> None:
    write("Rock Paper Scissors")
    write(f"Opponent strategies: {', '.join(session.selector.names())}")
    try:
        while True:
            key = read(PROMPT).strip().lower()
            if key in ("q", "quit"):
                break
            if not key:
                continue
            try:
                move = parse_move(key)
            except ValueError as e:
                logger.warning(str(e))
                continue
            outcome = session.play_turn(move)
            write(render(outcome, session.current_tally()))
    except (EOFError, KeyboardInterrupt):
        write("")
    finally:
        session.quit()


def main():
    cfg = load_config()
    configure_logging(cfg["logging"]["level"])
    run(make_session(cfg))


if __name__ == "__main__":
    main()
