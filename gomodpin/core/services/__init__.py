"""
Pin pipeline services.

Each stage is a plain module of pure-ish functions:

    modfile     → go.mod text → Manifest
    resolver    → requires + replaces → version map
    exclusions  → drop manifest excludes and the exclusion set
    render      → sorted ``replace (...)`` block
    writer      → backup, then append
"""
