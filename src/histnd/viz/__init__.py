"""
histnd.viz
==========

Quicklook plotting for histograms.

Design
------
• Plot modules are pure: they take arrays + metadata and return matplotlib figs/axes.
• The CLI handles file paths and decides when to plot.
"""
