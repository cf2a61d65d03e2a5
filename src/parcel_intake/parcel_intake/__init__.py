"""Parcel Intake package.

Feature modules (users, logs, history, summary) with a thin Flask controller
layer on top of service/repository layers.
"""
