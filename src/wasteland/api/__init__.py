"""HTTP surface for inspecting and driving a Wasteland game."""
