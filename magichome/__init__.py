"""Magic Home client package.

A Python library for controlling WiFi LED controllers that speak the
Magic Home (LEDENET) TCP protocol on port 5577.

Supports:
- Power and static RGB color commands
- Status refresh (power, mode, color)
- Optional background auto refresh
- Restoring the state captured at connect time
"""

__version__ = "0.1.0"
