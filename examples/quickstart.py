# %% [markdown]
# # FuzzyFuse: Quickstart
#
# **Typo-tolerant search with highlighting** - the Bitap algorithm in plain Python
#
# ---
#
# ## The Problem
#
# Your users type into a search bar. They skip letters, swap them, and never
# bother with capitals:
#
# ```
# "od mn war"   ->  "Old Man's War"
# "Te silm"     ->  "The Silmarillion"
# ```
#
# **FuzzyFuse** finds those matches, ranks them, and tells you exactly which
# characters matched so you can highlight them.
#
# ## Table of Contents
#
# | Part | Topic | Description |
# |------|-------|-------------|
# | 1 | One String | Score a single string, read the ranges |
# | 2 | A List of Strings | Rank a search bar's worth of titles |
# | 3 | Records | Search several weighted fields at once |
# | 4 | Tuning | threshold, distance, location, tokenize |

# %%
import fuzzyfuse as ff

# %% [markdown]
# ---
# ## Part 1: One String
#
# Scores run from 0.0 (exact match) to 1.0 (no match). Lower is better.

# %%
fuse = ff.Fuse()
title = "Old Man's War"
result = fuse.search_text_in_string("od mn war", title)
print(f"score:  {result.score:.4f}")
print(f"ranges: {result.ranges}")
print(f"marked: {ff.highlight(title, result.ranges)}")

# %% [markdown]
# When the same query runs against many strings, compile it once.

# %%
pattern = fuse.create_pattern("od mn war")
for title in ["Old Man's War", "Old Man's Wharf", "Lamb"]:
    hit = fuse.search(pattern, title)
    outcome = "no match" if hit is None else f"{hit.score:.3f}"
    print(f"  {title!r:20} -> {outcome}")

# %% [markdown]
# ---
# ## Part 2: A List of Strings
#
# Results come back best first, each with the index of the matching item.

# %%
books = [
    "Angels & Demons",
    "Old Man's War",
    "The Lock Artist",
    "HTML5",
    "Right Ho Jeeves",
    "The Code of the Wooster",
    "Thank You Jeeves",
    "The DaVinci Code",
    "The Silmarillion",
    "Syrup",
    "The Lost Symbol",
    "The Book of Lies",
    "Lamb",
    "Fool",
    "Incompetence",
    "Fat",
    "Colony",
    "Backwards, Red Dwarf",
    "The Grand Design",
    "The Book of Samson",
    "The Preservationist",
    "Fallen",
    "Monster 1959",
]

for query in ["Te silm", "jeves", "code"]:
    print(f"\nUser searched: {query!r}")
    for hit in fuse.search_text_in_iterable(query, books)[:3]:
        print(f"  [{hit.score:.3f}] {ff.highlight(books[hit.index], hit.ranges)}")

# %% [markdown]
# ---
# ## Part 3: Records
#
# Any object with `properties()` and `lookup(key)` can be searched field by
# field. A weight of 1.0 keeps a field's raw score; any other weight `w`
# scales it by `1 - w`, so heavier fields rank better.


# %%
class Book:
    def __init__(self, title, author):
        self.title = title
        self.author = author

    def properties(self):
        return [
            ff.FuseProperty.init_with_weight("title", 0.3),
            ff.FuseProperty.init_with_weight("author", 0.7),
        ]

    def lookup(self, key):
        return {"title": self.title, "author": self.author}.get(key)


records = [
    Book("Old Man's War fiction", "John X"),
    Book("Right Ho Jeeves", "P.D. Mans"),
]

for hit in fuse.search_text_in_fuse_list("man", records):
    print(f"record {hit.index}: score {hit.score:.3f}")
    for field_hit in hit.results:
        value = records[hit.index].lookup(field_hit.value)
        print(f"  {field_hit.value:7} {field_hit.score:.3f}  {ff.highlight(value, field_hit.ranges)}")

# %% [markdown]
# Plain dicts work too, through `MappingRecord`.

# %%
props = [ff.FuseProperty.init("name")]
rows = [ff.MappingRecord({"name": name}, props) for name in ["Syrup", "Syrup2", "Live"]]
print([(hit.index, hit.score) for hit in fuse.search_text_in_fuse_list("syrup", rows)])

# %% [markdown]
# ---
# ## Part 4: Tuning
#
# | Option | Default | Effect |
# |--------|---------|--------|
# | threshold | 0.6 | Scores above this are not matches |
# | location | 0 | Where in the text the match is expected |
# | distance | 100 | How fast the score decays away from `location` |
# | is_case_sensitive | False | Compare case exactly |
# | tokenize | False | Also score each word of the query |

# %%
strict = fuse.replace(threshold=0.1)
print("strict:", [books[h.index] for h in strict.search_text_in_iterable("jeves", books)])

anchored = ff.Fuse(distance=0)
print("anchored 'abc' in 'abcxx':", anchored.search_text_in_string("abc", "abcxx"))
print("anchored 'abc' in 'xxabc':", anchored.search_text_in_string("abc", "xxabc"))

tokenized = ff.Fuse(tokenize=True)
print("tokenized:", tokenized.search_text_in_string("war old", "Old Man's War"))
