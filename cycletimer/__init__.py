"""Cyclic countdown timer with an exclusively owned repeating time source"""
