"""
Training Package

Texel tuning pipeline for the evaluation weights:
- Loading labeled positions from EPD and book files
- Sparse position store reused across epochs
- Logistic scaling-constant search and mini-batch gradient descent
- Rendering of the tuned material values and piece-square tables
"""
