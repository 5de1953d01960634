# ---
# jupyter:
#   jupytext:
#     formats: ipynb,py:percent
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.18.1
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # Honey Production Bubble Chart
#
# This notebook animates US honey production from 1998 to 2012. Each state is
# a circle:
#
# - **x**: total production (lbs)
# - **y**: price per lb ($)
# - **radius**: number of honey-producing colonies
# - **color**: the state
#
# The chart sweeps through the years in 15 seconds. Hovering over the large
# year label stops the sweep and lets you scrub through time with the mouse.
#
# **Estimated time**: 5 minutes
#
# ## Learning Objectives
#
# - Build a `Dataset` from a long-form table with `records_from_dataframe`
# - Inspect individual frames without any GUI
# - Export evenly spaced frames for offline rendering
# - Attach the interactive matplotlib driver

# %%
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from motionchart import Dataset, MotionChart
from motionchart.animation import attach_matplotlib
from motionchart.io import records_from_dataframe

rng = np.random.default_rng(42)

# %% [markdown]
# ## Synthetic Data
#
# The real `honeyproduction.csv` has one row per (state, year). We build a
# table with the same columns, dropping a few rows at random so the series
# are sparse and irregular, as survey data often is.

# %%
states = ["AL", "AZ", "CA", "FL", "MN", "MT", "ND", "SD", "TX", "WI", "ID", "NY"]
years = np.arange(1998, 2013)
rows = []
for state in states:
    colonies = rng.uniform(1e4, 4.5e5)
    yield_per_colony = rng.uniform(45, 90)
    price = rng.uniform(0.55, 0.8)
    for year in years:
        if year not in (1998, 2012) and rng.random() < 0.3:
            continue
        colonies *= rng.uniform(0.9, 1.08)
        price *= rng.uniform(1.0, 1.12)
        rows.append(
            {
                "state": state,
                "year": int(year),
                "numcol": colonies,
                "totalprod": colonies * yield_per_colony,
                "priceperlb": price,
            }
        )
df = pd.DataFrame(rows)
df.head()

# %%
dataset = Dataset.from_records(records_from_dataframe(df))
print(dataset)
print(f"Time extent: {dataset.time_extent()}")

# %% [markdown]
# ## Frames Without a GUI
#
# A frame is a pure function of the dataset and a query time. States come
# back in draw order: largest circle first.

# %%
chart = MotionChart(dataset)
frame = chart.frame_at(2005.5)
for state in frame:
    print(f"{state.key}: x={state.x:7.1f} y={state.y:6.1f} r={state.radius:5.2f}")

# %% [markdown]
# ## Offline Export
#
# `frames(n)` returns evenly spaced frames between the first and last year,
# which is convenient for writing a video or a GIF with your tool of choice.

# %%
frames = chart.frames(60)
print(f"{len(frames)} frames from {frames[0].time} to {frames[-1].time}")

# %% [markdown]
# ## Interactive Chart
#
# Keep a reference to the returned driver; otherwise its timer may be garbage
# collected and the animation stops.

# %%
driver = attach_matplotlib(chart)
plt.show()
