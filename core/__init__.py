"""
page-digest core package.

Modules
───────
models     — Pydantic data models (SummaryResult, SummaryDraft)
errors     — PipelineError hierarchy, one subclass per failure kind
fetcher    — URL validation + timeout-bounded page fetch (httpx)
extractor  — article / main / paragraph text extraction (BeautifulSoup)
text       — whitespace normalisation and character clamping
summarizer — Claude call returning the raw completion text
parsing    — JSON object recovery from chatty output + result assembly
store      — SQLite-backed summary records (insert, get_all, get_by_id, delete)
pipeline   — fetch → extract → summarise → persist
history    — client-local recency history (upsert, remove, load, save)
"""
