# Task dashboard: in-memory task tracking and derived views
#
# Components:
#   schema.py        - Data model (User, Task, Priority)
#   store.py         - Storage contract and in-memory implementation
#   stats.py         - Summary counts for one owner
#   search.py        - Text / priority / status filtering
#   calendar_view.py - Due-date parsing and month grid placement
#   reports.py       - Week / month / quarter reports
#   goals.py         - Progress toward daily / weekly / monthly targets
#   validation.py    - Request payload validation
#   config.py        - Runtime configuration (YAML + env)
