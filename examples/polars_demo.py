# %% [markdown]
# # FuzzyFuse Polars Integration Demo
#
# This demo shows the two levels of API for fuzzy search with Polars.
#
# ## API Hierarchy
#
# | Level | Module | Input | Use Case |
# |-------|--------|-------|----------|
# | Core | `ff.Fuse` | strings, lists | Search plain Python data |
# | Polars Series | `ffp.search_series` | pl.Series | Rank a column |
# | Polars DataFrame | `ffp.search_dataframe` | pl.DataFrame | Rank rows by weighted columns |
# | Polars Expression | `.fuse.*` | pl.Expr | Expression chains |

# %%
import polars as pl

import fuzzyfuse as ff
from fuzzyfuse import polars as ffp

# %% [markdown]
# ---
# ## Section 1: Rank a Series
#
# The result holds the row index, the value, its score and the matched
# character ranges. Join it back on `index` to recover the other columns.

# %%
catalogue = pl.DataFrame(
    {
        "title": [
            "Old Man's War fiction",
            "Right Ho Jeeves",
            "The Silmarillion",
            "The Lock Artist",
            "The Lost Symbol",
            "Thank You Jeeves",
        ],
        "author": [
            "John X",
            "P.D. Mans",
            "J.R.R. Tolkien",
            "Steve Hamilton",
            "Dan Brown",
            "P.G. Wodehouse",
        ],
    }
).with_row_index("index")

hits = ffp.search_series(catalogue["title"], "Te silm")
print(hits)
print(hits.join(catalogue.select("index", "author"), on="index", how="left"))

# %% [markdown]
# ---
# ## Section 2: Rank DataFrame Rows
#
# Each searchable column gets a weight. The row score is the mean of the
# weighted scores of the columns that matched; columns that did not match
# show up as null.

# %%
ranked = ffp.search_dataframe(catalogue, "man", {"title": 0.3, "author": 0.7})
print(ranked)

# Large frames can be searched in parallel chunks of rows
print(ffp.search_dataframe(catalogue, "jeeves", {"title": 0.5}, chunk_size=2))

# %% [markdown]
# ---
# ## Section 3: Expression Namespace
#
# `.fuse` is registered on every Polars expression when fuzzyfuse is imported.

# %%
print(
    catalogue.with_columns(
        score=pl.col("title").fuse.score("jeves"),
        marked=pl.col("title").fuse.highlight("jeves", "**", "**"),
    )
)

print(catalogue.filter(pl.col("title").fuse.is_match("lost sym")))

# Pass a Fuse to change the search options
strict = ff.Fuse(threshold=0.2)
print(catalogue.select("title", score=pl.col("title").fuse.score("jeves", fuse=strict)))
