"""
Geometry package.

Parses the compositor's window and monitor feed and repairs the coordinates
reported by the accessibility tree against it.
"""
