"""Nuskha-e-Sehat Services.

Modules:
    actions: Server actions (validation, flow orchestration, response envelope).
    formatting: Assistant reply composition.
"""
