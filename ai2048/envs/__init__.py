# -*- coding: utf-8 -*-
"""
Python implementation of a 2048 game session.

This module provides the `TwentyFortyEight` class, which keeps the current board of a game and plays slides
followed by random tile placements on it.
"""

from .twentyfortyeight import TwentyFortyEight

__all__ = ["TwentyFortyEight"]
