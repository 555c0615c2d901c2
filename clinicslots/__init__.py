"""
clinicslots - appointment slot availability for the clinic dashboard.
"""

__version__ = "0.1.0"
