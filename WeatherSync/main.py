"""Shared weather runner: follows a calendar feed and keeps the shared weather record current."""
import argparse
import logging
import os
import signal
import sys
from typing import Optional, TextIO, Tuple

from dotenv import load_dotenv

from authority import AuthorityGate, UnauthorizedMutationError, environment_role, fixed_role
from climate import BIOME_MAPPINGS, Climate, Humidity, IncompleteParametersError, Season
from file_settings_store import JsonFileSettingsStore
from http_settings_store import HttpSettingsStore
from http_weather_generator import HttpWeatherGenerator
from settings_store import SettingsStoreBase, StoreReadError, StoreWriteError
from time_feed import iter_time_updates
from weather_engine import WeatherEngine
from weather_generator import WeatherGeneratorError
from weather_store import WeatherStore
from weather_view import build_view

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-sync.log")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Shared calendar weather")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--role", choices=["gm", "observer"], default=None,
                        help="Fix the role instead of reading WEATHER_ROLE on every call")
    parser.add_argument("--store-dir", default=None, help="Directory of JSON settings shared by all instances")
    parser.add_argument("--store-url", default=None, help="Key-value service shared by all instances")
    parser.add_argument("--generator-url", default=None)
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--input", default="-", help="Calendar feed (JSON lines), '-' for stdin")
    parser.add_argument("--climate", choices=[c.name.lower() for c in Climate], default=None)
    parser.add_argument("--humidity", choices=[h.name.lower() for h in Humidity], default=None)
    parser.add_argument("--season", choices=[s.name.lower() for s in Season], default=None)
    parser.add_argument("--biome", choices=sorted(BIOME_MAPPINGS), default=None,
                        help="Biome preset; sets climate and humidity together")
    parser.add_argument("--regenerate", action="store_true",
                        help="Regenerate weather from the current selections after loading")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_config(args: argparse.Namespace) -> Tuple[Optional[str], Optional[str], str, int]:
    load_dotenv()
    store_url = args.store_url or os.getenv("WEATHER_STORE_URL")
    store_dir = args.store_dir or os.getenv("WEATHER_STORE_DIR")
    generator_url = args.generator_url or os.getenv("WEATHER_GENERATOR_URL")
    timeout = os.getenv("WEATHER_HTTP_TIMEOUT")

    if not store_url and not store_dir:
        raise SystemExit("Missing WEATHER_STORE_URL or WEATHER_STORE_DIR in environment")
    if not generator_url:
        raise SystemExit("Missing WEATHER_GENERATOR_URL in environment")

    timeout_val = args.timeout
    if timeout:
        try:
            timeout_val = int(timeout)
        except ValueError as exc:
            raise SystemExit(f"Invalid WEATHER_HTTP_TIMEOUT: {exc}") from exc

    logging.info(
        "Configuration loaded: store=%s generator=%s timeout=%s",
        store_url or store_dir,
        generator_url,
        timeout_val,
    )
    return store_url, store_dir, generator_url, timeout_val


def build_settings_store(store_url: Optional[str], store_dir: Optional[str], timeout: int) -> SettingsStoreBase:
    if store_url:
        return HttpSettingsStore(store_url, timeout=timeout, token=os.getenv("WEATHER_STORE_TOKEN"))
    return JsonFileSettingsStore(store_dir)


def build_engine(args: argparse.Namespace) -> WeatherEngine:
    store_url, store_dir, generator_url, timeout = load_config(args)

    if args.role is not None:
        authority = AuthorityGate(fixed_role(args.role == "gm"))
    else:
        authority = AuthorityGate(environment_role())

    engine = WeatherEngine(
        store=WeatherStore(build_settings_store(store_url, store_dir, timeout)),
        generator=HttpWeatherGenerator(generator_url, timeout=timeout),
        authority=authority,
    )
    logging.info("Weather engine ready (authoritative=%s)", authority.is_authoritative())
    return engine


def apply_selections(engine: WeatherEngine, args: argparse.Namespace) -> None:
    """Store any climate selections given on the command line. The biome goes first so explicit values win."""
    if args.biome:
        engine.select_biome(args.biome)

    climate = Climate[args.climate.upper()] if args.climate else None
    humidity = Humidity[args.humidity.upper()] if args.humidity else None
    season = Season[args.season.upper()] if args.season else None
    if climate is not None or humidity is not None or season is not None:
        params = engine.update_parameters(climate=climate, humidity=humidity, season=season)
        logging.info(
            "Selections: climate=%s humidity=%s season=%s",
            params.climate.name,
            params.humidity.name,
            params.season.name,
        )


def format_view_line(view: dict) -> str:
    date = view["display_date"] or view["formatted_date"] or "--"
    parts = [date, view["formatted_time"], view["weekday"]]
    if not view["hide_weather"]:
        parts.extend([view["current_temperature"], view["current_description"]])
    return "  ".join(part for part in parts if part)


def print_view(engine: WeatherEngine, out: TextIO) -> None:
    view = build_view(
        engine.current_record,
        engine.authority.is_authoritative(),
        engine.store.read_display_options(),
    )
    out.write(format_view_line(view) + "\n")
    out.flush()


def feed_loop(engine: WeatherEngine, lines, out: TextIO) -> None:
    dirty = [False]

    def mark_dirty() -> None:
        dirty[0] = True

    unsubscribe = engine.subscribe(mark_dirty)
    try:
        for tick, snapshot in enumerate(iter_time_updates(lines), start=1):
            logging.debug("Tick %s: %s", tick, snapshot)
            try:
                if not engine.authority.is_authoritative():
                    # Observers pick up whatever the authoritative instance committed
                    engine.on_store_update()
                engine.on_time_update(snapshot)
                if dirty[0]:
                    print_view(engine, out)
                    dirty[0] = False
            except (StoreReadError, StoreWriteError) as err:
                logging.error("Store failure, keeping last weather: %s", err)
            except WeatherGeneratorError as err:
                logging.error("Weather generation failed, keeping last weather: %s", err)
    finally:
        unsubscribe()


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    engine = build_engine(args)

    signal.signal(signal.SIGTERM, signal_handler)

    try:
        engine.initialize()
        apply_selections(engine, args)
        if args.regenerate:
            engine.manual_regenerate(engine.current_parameters())
        print_view(engine, sys.stdout)
    except (StoreReadError, StoreWriteError, WeatherGeneratorError) as err:
        logging.error("Failed to load weather: %s", err)
        return 1
    except (UnauthorizedMutationError, IncompleteParametersError) as err:
        logging.error("Change rejected: %s", err)
        return 1

    stream = sys.stdin if args.input == "-" else open(args.input, "r", encoding="utf-8")
    try:
        feed_loop(engine, stream, sys.stdout)
    except KeyboardInterrupt:
        logging.info("Stopping weather sync")
    finally:
        if stream is not sys.stdin:
            stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
