# Marks `formintake.deps` as a package so `from formintake.deps.auth import require_user` works.
