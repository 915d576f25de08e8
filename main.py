#!/usr/bin/env python3
"""
Combat Units - Entry Point
═══════════════════════════════════════════════════════════════════════════

Uruchamia scenariusz demonstracyjny z scenarios.yaml.

Użycie:
    python main.py                           # Domyślny scenariusz (base_unit)
    python main.py --scenario heavy_defense  # Konkretny scenariusz
    python main.py --list                    # Lista scenariuszy
    python main.py --save output/log.json    # Zapis logu narracji
    python main.py --verbose                 # Statystyki zdarzeń

Wynik:
    - Wypisuje narrację na konsolę
    - Opcjonalnie zapisuje pełny log do pliku JSON
"""

import argparse
import sys

from combat_units.core.config_loader import ConfigLoader
from combat_units.events.narrator import Narrator, EventType
from combat_units.scenario.scenario import Scenario


def build_parser() -> argparse.ArgumentParser:
    """Tworzy parser argumentów."""
    parser = argparse.ArgumentParser(
        description="Combat Units demonstration runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scenario", "-s",
        default="base_unit",
        help="ID scenariusza z scenarios.yaml (domyślnie: base_unit)"
    )
    parser.add_argument(
        "--data",
        default=None,
        help="Folder z plikami YAML (domyślnie: dane pakietu)"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Wypisz dostępne scenariusze i zakończ"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Nie wypisuj narracji"
    )
    parser.add_argument(
        "--save",
        default=None,
        help="Zapisz log narracji do pliku JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    return parser


def main(argv=None) -> int:
    """Główna funkcja."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(args.data)

    try:
        if args.list:
            for scenario_id in loader.get_scenario_ids():
                title = loader.load_scenario(scenario_id)["title"]
                print(f"{scenario_id:20s} {title}")
            return 0

        definition = loader.load_scenario(args.scenario)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 2
    except FileNotFoundError as e:
        print(f"Error: missing data file {e.filename}", file=sys.stderr)
        return 2

    narration = loader.get_narration_config()
    narrator = Narrator(
        echo=narration["echo"] and not args.quiet,
        record=narration["record"] or bool(args.save) or args.verbose,
    )

    scenario = Scenario.from_config(definition, narrator=narrator, loader=loader)
    result = scenario.run()

    print()
    print("=" * 60)
    print(f"WYNIKI: {result['title']}")
    print("=" * 60)
    for handle in result["disposal_order"]:
        unit = result["units"][handle]
        print(
            f"  - {handle} ({unit['variant']}) {unit['name']}: "
            f"HP {unit['hit_points']}, EP {unit['energy_points']}, AD {unit['attack_damage']}"
        )

    save_path = args.save or narration["save_log"]
    if save_path:
        scenario.save_log(save_path)
        print()
        print(f"Log zapisany: {save_path}")

    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)
        for event_type in EventType:
            count = len(narrator.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
