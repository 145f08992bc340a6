"""
Communicating with Bluetooth hardware requires calling OS-specific APIs. These
are abstracted as "backends". Only the BlueZ D-Bus backend on Linux is
available.
"""
