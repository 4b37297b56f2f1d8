"""
Application Layer for the training analytics core.

This package contains:
- ports/: Abstract repository interfaces (what the core needs)
- use_cases/: Set- and workout-completion handlers that run the core
  and issue the resulting persistence side effects
"""
