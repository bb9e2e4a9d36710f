"""FlexWise - school administration core."""
