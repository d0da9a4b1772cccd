"""CHIP-8 opcode handlers, grouped by instruction family."""
