"""Core modules for the Expense Dashboard application."""

from . import filters, insights, models, settings, store, synth, utils, viz

__all__ = [
	"filters",
	"insights",
	"models",
	"settings",
	"store",
	"synth",
	"utils",
	"viz",
]
