"""tapecalc — Sequential arithmetic calculator.

Digits, operators, equals, clear, percentage/square root/square, a memory
register and a 50-entry history. Operators chain left to right with no
precedence: 5 + 3 * 2 = gives 16.

Usage:
    python -m tapecalc run 5 + 3 '*' 2 =     # Feed keys, show the display
    python -m tapecalc repl                  # Interactive session
    python -m tapecalc keys                  # Show key bindings
"""
