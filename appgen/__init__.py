"""appgen -- generate React Native starter apps from plain-text requests.

New apps are classified into one of five starter templates and rendered
with the requested name and theme colors. Follow-up requests ("change the
color to green", "add Garlic Bread for $5.99") edit the generated sources
in place through the modification engine.
"""

__version__ = "0.1.0"
