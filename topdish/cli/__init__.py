# =============================================================================
# topdish/cli/__init__.py -- CLI Module Overview
# =============================================================================
#
# Command-line tools for running topdish outside of a web frontend.
#
#   ANALYSIS (analyze.py)
#      Reads a JSON file of reviews, suggests dish categories, ranks the
#      top dishes and prints a report or JSON.
#
# Run with `python -m topdish.cli.analyze` or `python -m topdish.cli`.
# =============================================================================
