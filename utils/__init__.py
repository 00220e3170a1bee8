# utils
