"""gridmeasures/core — types, configuration, errors, validation and the grid contract."""
