"""
AirSlide Presenter Module

Turns navigation events into page changes.
"""
from .navigator import PageNavigator

__all__ = [
    'PageNavigator',
]
