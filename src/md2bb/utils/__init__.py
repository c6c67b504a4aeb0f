#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Helper utilities shared by the md2bb parser, translator and CLI."""
