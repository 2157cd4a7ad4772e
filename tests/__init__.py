"""Test package for Bubble Count.

Core tests (sprites, placement, input, game loop) use recording doubles and
need no display.  The smoke and render tests run pygame headlessly with the
dummy SDL drivers.  Run ``pytest`` from the project root.
"""
