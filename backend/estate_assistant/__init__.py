"""
Broker Assistant - chat assistant and lead scoring for real estate brokers.
"""

__version__ = "1.0.0"
