"""Application layer ports"""
