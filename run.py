#!/usr/bin/env python3
"""
Convenience wrapper for tradestats.run module.
Allows running: python run.py [command]
Instead of: python -m tradestats.run [command]
"""

if __name__ == "__main__":
    from tradestats.run import main
    main()
