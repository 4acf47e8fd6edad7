"""
Notifications Package.

Local notification requests, the notification center interface and the
identifier scheme that ties a delivered notification back to its note.
The action dispatcher lives in modules.remind.notifications.actions and
is imported from there, since it depends on the note store.
"""
