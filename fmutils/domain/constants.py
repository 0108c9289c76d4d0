"""Path syntax constants shared by mask building and traversal."""

# Separates segments of a field path ("profile.user.name").
PATH_DELIMITER = '.'

# Reserved segment matching any field name or map key not matched exactly.
WILDCARD = '*'
