"""HTTP adapter for StyleMorph."""
