"""
Framework-independent controllers for list screens and forms.

- ``list_view``: sort/search/infinite-scroll wiring and mutation feedback
- ``row_status``: transient saved/deleted row states
- ``forms``: transaction form validation and submission
- ``registry``: one set of controllers per browser session
"""
