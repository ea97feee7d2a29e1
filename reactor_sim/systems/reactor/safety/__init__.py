"""Phase classification and reactor trip logic"""
