'''Resolvers for the geospatial tile and place lookup API'''
