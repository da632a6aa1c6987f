"""CareerTrack: resume uploads, simulated analysis and job application tracking."""

__version__ = "0.1.0"
