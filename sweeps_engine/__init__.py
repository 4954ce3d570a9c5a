"""Sweepstakes wagering and outcome engine"""

__version__ = "1.0.0"
