#!/usr/bin/env python3
"""
Card pool simulator - runs many playouts and reports who wins
"""

from cardsim.cli.__main__ import main


if __name__ == '__main__':
    main()
