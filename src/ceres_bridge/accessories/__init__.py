"""
Accessory abstraction: presentation services, characteristics, climate state
mapping and the host bridge boundary
"""
