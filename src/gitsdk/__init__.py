"""
git-sdk-fetch: resolve and download Git for Windows SDK artifacts.
"""
