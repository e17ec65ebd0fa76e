"""
TypeRig - interactive test rig for dynamically built Python types.

Compiles a folder of source units, loads the classes they export,
and lets an operator instantiate one and poke at its properties.
"""

__version__ = "1.0.0"
