"""
Session loop, scrolling, rendering and the completion client.
"""
