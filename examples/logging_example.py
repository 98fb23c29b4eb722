"""Demonstrates how to enable and configure logging in cattree.

cattree logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, cattree logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``STAGE`` level
  (numeric value 25, between INFO and WARNING) marks pipeline stages and is
  the default. Stage records show their stage in brackets, e.g. ``[fit]``. ``DEBUG`` adds every chosen split; ``TRACE`` adds leaf formation.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Error logging: rejected input (e.g. an unknown split metric) is logged at
  WARNING before the exception propagates.
"""

from cattree import enable_logging, evaluate, extract_rules, fit_tree, split_dataset
from cattree.exceptions import UnknownMetricError

attribute_names = ["Outlook", "Temperature", "Humidity", "Wind", "PlayTennis"]
rows = [
    ("sunny", "hot", "high", "weak", "no"),
    ("sunny", "hot", "high", "strong", "no"),
    ("overcast", "hot", "high", "weak", "yes"),
    ("rain", "mild", "high", "weak", "yes"),
    ("rain", "cool", "normal", "weak", "yes"),
    ("rain", "cool", "normal", "strong", "no"),
    ("overcast", "cool", "normal", "strong", "yes"),
    ("sunny", "mild", "high", "weak", "no"),
    ("sunny", "cool", "normal", "weak", "yes"),
    ("rain", "mild", "normal", "weak", "yes"),
    ("sunny", "mild", "normal", "strong", "yes"),
    ("overcast", "mild", "high", "strong", "yes"),
    ("overcast", "hot", "normal", "weak", "yes"),
    ("rain", "mild", "high", "strong", "no"),
]

# Enable logging at DEBUG level with full log format to see each split as it is chosen
with enable_logging(level="DEBUG", log_format="full"):
    train_rows, test_rows = split_dataset(rows, 0.7, seed=0)

    tree = fit_tree(train_rows, attribute_names, "PlayTennis", metric="info")
    for rule in extract_rules(tree):
        print(rule)

    evaluate(tree, test_rows, attribute_names.index("PlayTennis"))

    # Try an unknown metric to show error logging
    try:
        fit_tree(train_rows, attribute_names, "PlayTennis", metric="entropy")
    except UnknownMetricError as exc:
        print(f"\n{exc}\n")

# Logging automatically disabled here
