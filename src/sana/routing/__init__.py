"""Routing — pattern compiler, handler variants, and the ordered router.

Routes are registered during start-up and matched in registration order
for every request.
"""
