"""Funnelcraft - compose competitor email funnels into timelines."""
