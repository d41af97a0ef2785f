"""
Access Control Management Service

Administrative backend for physical access control:
- Servers and Devices: the controllers that enforce access
- Groups and Rules: which devices a person may use, and when
- Attendances: working-hour windows with grace offsets
- People and Users: cardholders and dashboard operators
"""

__version__ = "0.1.0"
