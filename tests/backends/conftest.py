import sys

collect_ignore = []

if not sys.platform.startswith("linux"):
    """BlueZ and the D-Bus system bus only exist on Linux"""
    collect_ignore.append("bluezdbus")
