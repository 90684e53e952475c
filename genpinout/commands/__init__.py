"""Command records and the CSV script parser."""

from genpinout.commands.models import Command
from genpinout.commands.parser import parse_csv, parse_csv_file

__all__ = ["Command", "parse_csv", "parse_csv_file"]
