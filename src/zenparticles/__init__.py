"""
ZenParticles 3D: a gesture-driven morphing point cloud.
"""
