"""
Services for shared-cache builds.

- keys: mangled names of exported status records
- indicator: indicator file names, writer and reader
- status: build status snapshots and their diff
- sync: status export and import
- build: make/delete wrappers that keep shared status in step
- cache: indicator-driven recipes over an artifact cache
"""
