"""Syndrome-Trellis Coding: H-hat generation, Viterbi embedding and extraction."""