"""
Builtin Macro Scripts.

Every public module in this package registers one macro with
`register_macro`. The registry imports them on first lookup; adding a new file
here is enough to make its macro available.
"""
