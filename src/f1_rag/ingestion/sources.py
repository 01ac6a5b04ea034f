"""The fixed set of pages ingested on every run."""

from __future__ import annotations

F1_SOURCE_URLS: tuple[str, ...] = (
    "https://en.wikipedia.org/wiki/Formula_One",
    "https://www.formula1.com/en/results.html/2025/races/1169/bahrain/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1170/saudi-arabia/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1171/azerbaijan/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1172/spain/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1173/monaco/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1174/canada/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1175/austria/race-result.html",
    "https://www.formula1.com/en/results.html/2025/races/1176/britain/race-result.html",
)
