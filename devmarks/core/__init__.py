"""
Shared, cross-cutting code for the API.

`core/` contains small building blocks that multiple features use
(settings, DB wiring, error bodies, mail delivery, logging). Keep
feature-specific SQL and business logic in the corresponding feature
package (e.g. `users/`, `projects/`).
"""
