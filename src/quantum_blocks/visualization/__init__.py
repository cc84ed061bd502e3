"""pygame play window for Quantum Blocks."""
