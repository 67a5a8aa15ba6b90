"""Guild management simulation — rules engine"""
