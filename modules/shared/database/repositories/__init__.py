"""Repositories Package - Data Access Layer"""
