"""event_registration
====================

Conference registration demo: a dot-matrix text logo with a running-point
animation, an in-memory attendee service exposed over HTTP, and a
registry-driven registration form.

The logo pipeline is::

    text -> glyphs -> layout -> PointRegistry -> AnimationStepper -> renderer

See :mod:`event_registration.points` for the ordered point registry that the
rest of the logo code builds on.
"""
