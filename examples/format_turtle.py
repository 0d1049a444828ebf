"""Example: reformat a small Turtle document with the style from examples/config/formatter.yaml."""
from __future__ import annotations

from pathlib import Path

from sf_turtle_formatter import TurtleFormatter
from sf_turtle_formatter.common.config import ConfigManager

DEMO = """
@prefix ex: <http://example.com/ns#> .
ex:alice ex:knows [ ex:name "Carol" ], ex:bob ; a ex:Person ;
  ex:tags ( "a" "b" ) ;
  ex:address _:home .
ex:bob ex:address _:home .
_:home ex:city "Berlin" .
"""


def main() -> None:
    config_path = Path(__file__).resolve().parent / "config" / "formatter.yaml"
    ConfigManager.load(override_path=config_path)
    formatter = TurtleFormatter()
    print(formatter.apply_to_content(DEMO), end="")


if __name__ == "__main__":
    main()
