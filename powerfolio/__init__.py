"""PowerFolio portfolio-sharing API"""
