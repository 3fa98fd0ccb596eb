"""srcstats - aggregate text statistics over many files"""
