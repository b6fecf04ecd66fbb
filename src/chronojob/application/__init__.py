"""Application layer – the scheduler and its ports."""
