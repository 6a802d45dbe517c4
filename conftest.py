"""
Here so that pytest puts the project root on sys.path, where yarnball lives.
"""
