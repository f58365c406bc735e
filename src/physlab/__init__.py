"""PhysLab: fixed-step classroom physics scenarios with analytic summaries."""

__version__ = "1.0.0"
