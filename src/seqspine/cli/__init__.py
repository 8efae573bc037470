"""``seq-spine`` command line interface (Typer)."""
