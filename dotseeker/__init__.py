"""A 2D dot-seeking arena with a numpy deep Q-network agent and training step."""

__version__ = "0.1.0"
__all__ = ["agent", "world", "memory", "network", "dqn_agent", "optim", "app"]