"""
natgeo_wallpapers

Download the National Geographic Photo of the Day and use it as a desktop wallpaper
across monitors and virtual desktops.
"""
